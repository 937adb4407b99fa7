"""HTTP middleware: security headers, rate limiting and error handlers."""
