# -*- coding: utf-8 -*-
"""Oracle adapter — external nutrition and workout estimation."""
