"""Opt-in JAX autodiff engine."""
