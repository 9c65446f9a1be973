"""Annotation limits, settings and markup templates."""
