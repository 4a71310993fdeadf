"""Engine, sessions and declarative base."""
