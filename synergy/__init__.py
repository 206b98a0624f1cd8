# -*- coding: utf-8 -*-
"""Synergy planner backend: tasks, notes, diet log and workouts with AI estimates."""

__version__ = "0.1.0"
