"""Business services used by the API routers."""
