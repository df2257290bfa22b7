"""Consultation booking portal backend."""
