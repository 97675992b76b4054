"""Scan, route mapping and rendering pipeline."""
