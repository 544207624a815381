from rest_framework.pagination import LimitOffsetPagination


class SessionPagination(LimitOffsetPagination):
    """`?limit=&skip=` paging; bad or missing values fall back to the defaults."""
    default_limit = 20
    max_limit = 100
    limit_query_param = "limit"
    offset_query_param = "skip"
