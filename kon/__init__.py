"""Kon - интерпретатор выражений."""
