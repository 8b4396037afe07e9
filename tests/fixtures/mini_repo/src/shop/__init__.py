"""Order-taking fixture service."""
