"""
Boundary layer for external system integrations.

Adapters for the key-value status store and the job queue runtime.
"""
