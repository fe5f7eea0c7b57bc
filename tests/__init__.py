"""Test package for optrisk."""
