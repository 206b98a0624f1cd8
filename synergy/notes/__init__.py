# -*- coding: utf-8 -*-
"""Notes domain (block documents + editor save rules)."""
