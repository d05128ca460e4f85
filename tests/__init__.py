"""Tests for the post-login identity verification hooks."""
