"""
URL configuration for tutoring project.

/admin/   Django admin
/graphql/ GraphQL API (GraphiQL in the browser when DEBUG is on)
"""
import json
import logging

from django.conf import settings
from django.contrib import admin
from django.urls import path
from django.views.decorators.csrf import csrf_exempt
from strawberry.django.views import GraphQLView

from core.graphql.schema import schema

logger = logging.getLogger(__name__)


# Error code in extensions -> HTTP status
ERROR_STATUS_CODES = {
    'UNAUTHENTICATED': 401,
    'FORBIDDEN': 403,
    'NOT_FOUND': 404,
    'CONFLICT': 409,
    'BAD_FORMAT': 400,
    'UNAVAILABLE': 400,
    'INVALID_STATE': 400,
}


def status_for_error(error):
    """HTTP status for one formatted GraphQL error"""
    code = (error.get('extensions') or {}).get('code')
    if code in ERROR_STATUS_CODES:
        return ERROR_STATUS_CODES[code]

    # Errors raised by graphql-core itself (bad query, wrong argument type)
    error_message = error.get('message', '').lower()
    if any(keyword in error_message for keyword in [
        'authentication', 'not authenticated', 'unauthorized', 'invalid token'
    ]):
        return 401
    if any(keyword in error_message for keyword in [
        'not found', 'does not exist'
    ]):
        return 404
    return 400


class CustomGraphQLView(GraphQLView):
    """Custom GraphQL view that returns proper HTTP status codes for errors"""

    def dispatch(self, request, *args, **kwargs):
        response = super().dispatch(request, *args, **kwargs)

        if response.status_code != 200 or 'application/json' not in response.get('Content-Type', ''):
            return response

        # Parse response to check for errors
        try:
            response_data = json.loads(response.content)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return response

        errors = response_data.get('errors') if isinstance(response_data, dict) else None
        if errors:
            # The first error decides the status
            response.status_code = status_for_error(errors[0])
            logger.info(
                "GraphQL request failed with %s: %s",
                response.status_code, errors[0].get('message')
            )

        return response


urlpatterns = [
    path('admin/', admin.site.urls),
    path("graphql/", csrf_exempt(CustomGraphQLView.as_view(schema=schema, graphql_ide='graphiql' if settings.DEBUG else None))),
]
