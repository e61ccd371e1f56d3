"""
Domain layer for the order-to-shipment workflow.
Contains business logic, factories and managers separated from data
persistence concerns.
"""
