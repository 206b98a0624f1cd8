# -*- coding: utf-8 -*-
"""User preferences (theme)."""
