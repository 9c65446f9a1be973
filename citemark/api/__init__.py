"""Payload models and the annotation service used by HTTP layers."""
