"""Test package helpers shared across tfguardian suites."""
