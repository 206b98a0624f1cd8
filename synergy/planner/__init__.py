# -*- coding: utf-8 -*-
"""Planner domain (tasks bucketed by calendar day)."""
