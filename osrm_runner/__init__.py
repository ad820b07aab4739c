"""
osrm_runner package initialization.

Load generator for OSRM‑style routing servers: samples query points inside a
region, fires the queries concurrently and prints one timed result per query.
"""

__version__ = "0.1.0"
