from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


def normalize_direction(direction) -> str:
    """Map a sort direction query value to 'asc' or 'desc'; unknown values sort ascending."""
    return "desc" if (direction or "").strip().lower() == "desc" else "asc"


class PageResponsePagination(PageNumberPagination):
    """
    Page of results with the totals the front end needs.

    ?page=1&size=20 (size capped at 100). The sort/direction query params
    are echoed back as they were applied by the view.
    """

    page_size = 20
    page_size_query_param = "size"
    max_page_size = 100

    def get_paginated_response(self, data):
        page = self.page
        return Response(
            {
                "content": data,
                "page": page.number,
                "size": page.paginator.per_page,
                "total_elements": page.paginator.count,
                "total_pages": page.paginator.num_pages,
                "first": not page.has_previous(),
                "last": not page.has_next(),
                "empty": len(data) == 0,
                "sort": self.request.query_params.get("sort") or "id",
                "direction": normalize_direction(
                    self.request.query_params.get("direction")
                ),
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "required": ["content", "page", "size", "total_elements"],
            "properties": {
                "content": schema,
                "page": {"type": "integer", "example": 1},
                "size": {"type": "integer", "example": 20},
                "total_elements": {"type": "integer", "example": 42},
                "total_pages": {"type": "integer", "example": 3},
                "first": {"type": "boolean"},
                "last": {"type": "boolean"},
                "empty": {"type": "boolean"},
                "sort": {"type": "string", "example": "id"},
                "direction": {"type": "string", "example": "asc"},
            },
        }
