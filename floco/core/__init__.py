"""
Core of floco: numeric backend, validation policies and serialization.

Nothing here depends on a host application; policies are supplied by the
consumer.
"""
