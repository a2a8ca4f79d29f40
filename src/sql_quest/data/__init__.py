"""Bundled fixture data: the sample e-commerce dataset and the quiz bank."""
