"""Sample configuration package scanned by manifest tests."""
