"""
Cardview Controllers Package.
"""
from cardstack.cardview.controllers.sort_controller import SortController
from cardstack.cardview.controllers.filter_controller import FilterController
from cardstack.cardview.controllers.group_controller import GroupController
from cardstack.cardview.controllers.pagination_controller import PaginationController

__all__ = ["SortController", "FilterController", "GroupController", "PaginationController"]
