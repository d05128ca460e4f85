"""HTTP routes for the post-login hooks."""
