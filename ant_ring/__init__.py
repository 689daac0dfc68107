"""Ant ring collision simulation."""
