from .pareto import nondominated_mask, pareto_filter

__all__ = ["nondominated_mask", "pareto_filter"]
