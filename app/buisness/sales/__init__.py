"""
Sales business layer: order numbers, pricing and the order lifecycle.
"""
