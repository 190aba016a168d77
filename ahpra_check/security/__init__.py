"""Injection scanning and the compliance audit trail."""
