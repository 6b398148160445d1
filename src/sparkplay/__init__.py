"""Spark Playground: a deterministic cost model for a read/join/write Spark job."""

__version__ = "0.1.0"
