"""Settings package for the club reservation backend.

`base.py` contains the configuration shared by every environment. The
`dev.py`, `prod.py` and `test.py` modules extend it with environment
specific overrides.
"""
