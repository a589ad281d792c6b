"""FreelanceHub API package."""
