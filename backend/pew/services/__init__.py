"""Server-side domain services.

Kept free of HTTP and socket concerns so routes stay thin and the logic can
be tested without a request context.
"""
