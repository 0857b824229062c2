"""Building blocks shared by the Groups context and the infrastructure layer.

Holds the event publisher interface, the observation context carried by
probes, the translatable error messages and the transaction step error.
Nothing here imports from ``groups`` or ``infrastructure``.
"""
