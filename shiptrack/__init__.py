"""Shipment tracking and user management backend."""
