"""Derived business metrics for a product.

Pure functions, recomputed on every call and never stored. Any missing
operand yields 0 instead of an error.
"""

from agropecuario.core.entities import Product


def total_revenue(product: Product) -> float:
    """Produced quantity times sale price."""
    if product.produced_quantity is None or product.sale_price is None:
        return 0.0
    return product.produced_quantity * product.sale_price


def profitability(product: Product) -> float:
    """Net profit per cultivated hectare."""
    hectares = product.cultivated_hectares
    if not hectares or product.production_cost is None:
        return 0.0

    total_cost = product.production_cost * hectares
    return (total_revenue(product) - total_cost) / hectares


def profit_margin(product: Product) -> float:
    """Markup of sale price over production cost, as a percentage."""
    cost = product.production_cost
    if not cost or product.sale_price is None:
        return 0.0
    return ((product.sale_price - cost) / cost) * 100
