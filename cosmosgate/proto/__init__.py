"""Protobuf message types known to the gateway."""
