"""
Activations module - Device activations.

This module handles:
- Activation entity and the per-license activation registry
- Activate and verify use cases
"""
