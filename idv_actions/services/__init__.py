"""External services used by the post-login hooks."""
