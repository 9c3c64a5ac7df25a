"""libtest compatible console reporting."""
