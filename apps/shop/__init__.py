"""Shop app package.

Club merchandise: products with optional stock tracking and member
orders. Order creation reserves stock with conditional atomic updates
and cancellation gives back exactly what was reserved, once.
"""
