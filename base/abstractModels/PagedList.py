from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from base import Constants


class PagedList(PageNumberPagination):
    """ Page number paginator for place listings """

    page_size = Constants.DEFAULT_PAGE_SIZE
    page_size_query_param = "pageSize"  # Optionally allow the client to override the default page size
    max_page_size = Constants.MAX_PAGE_SIZE

    def get_paginated_response(self, data):
        return Response({
            "count": self.page.paginator.count,
            "pageSize": self.get_page_size(self.request),
            "totalPages": self.page.paginator.num_pages,
            "next": self.get_next_link(),
            "previous": self.get_previous_link(),
            "results": data
        })
