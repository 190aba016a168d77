"""Structured form schemas and the comprehensive input validator."""
