"""Filter stage: date-range selection and paginated match listing."""

from matchstats.filtering.dates import (
    filter_by_date,
    in_date_range,
    parse_date_bound,
    validate_date_range,
)
from matchstats.filtering.pagination import paginate_matches

__all__ = [
    "filter_by_date",
    "in_date_range",
    "paginate_matches",
    "parse_date_bound",
    "validate_date_range",
]
