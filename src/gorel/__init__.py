"""Release automation for Go modules: bump, retag and re-path on release."""
