"""API routers, mounted under /api by freelancehub.main."""
