"""Members app package.

Club members are plain records; the only contested resource here is the
member number, minted from the ``member_number`` sequence on creation.
"""
