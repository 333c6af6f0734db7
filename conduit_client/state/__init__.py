"""Reactive state primitives."""

from conduit_client.state.cell import EventStream, StateCell, Subscription

__all__ = ["EventStream", "StateCell", "Subscription"]
