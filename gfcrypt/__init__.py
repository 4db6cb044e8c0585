"""GF(2^128) arithmetic, polynomial factoring, SEA-128, XEX, GCM and related attacks, run from JSON testcases."""

__version__ = "0.1.0"