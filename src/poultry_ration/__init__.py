"""Poultry feed-ration formulation engine."""
