"""Request controllers for the post-login hooks."""
