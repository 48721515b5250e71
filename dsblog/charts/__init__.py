"""Plotly charts from the posts."""
