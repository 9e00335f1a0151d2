"""Hotels app package.

This app holds the hotel listings and the public hotel search, which
narrows each hotel's rooms by price and, when a stay is given, by live
availability.
"""
