"""docbundle — assemble per-project documentation bundles."""

__version__ = "0.1.0"
