# -*- coding: utf-8 -*-
"""Diet domain (food log, daily macro totals, AI estimates)."""
