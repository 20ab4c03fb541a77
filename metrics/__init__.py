"""Metric catalog, models and rendering"""
