"""Theo Runner - an endless runner starring Theo the cat."""

__version__ = "0.1.0"
