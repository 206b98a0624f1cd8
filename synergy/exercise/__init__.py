# -*- coding: utf-8 -*-
"""Exercise domain (workout log keyed by YYYY-MM-DD, AI schedules)."""
