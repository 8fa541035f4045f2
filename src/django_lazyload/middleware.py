from collections.abc import Callable

from asgiref.sync import iscoroutinefunction, markcoroutinefunction
from django.http import HttpRequest, HttpResponse, StreamingHttpResponse
from django.http.response import HttpResponseBase
from django.utils.decorators import sync_and_async_middleware

from django_lazyload.content import filter_post_content, is_exit
from django_lazyload.util.logger import logger, trace


@sync_and_async_middleware
class LazyloadMiddleware:
    """
    Middleware that lazy loads images and embeds in the whole HTML response.

    Use it instead of the template filters when you can't or don't want to mark
    the individual places in the templates. Which tags are processed is decided
    by the `content_imgs` and `embed` settings.

    ```python
    MIDDLEWARE = [
        ...,
        "django_lazyload.middleware.LazyloadMiddleware",
    ]
    ```
    """

    def __init__(self, get_response: "Callable[[HttpRequest], HttpResponse]") -> None:
        self.get_response = get_response

        if iscoroutinefunction(self.get_response):
            markcoroutinefunction(self)

    def __call__(self, request: HttpRequest) -> HttpResponseBase:
        if iscoroutinefunction(self):
            return self.__acall__(request)

        response = self.get_response(request)
        response = self.process_response(request, response)
        return response

    async def __acall__(self, request: HttpRequest) -> HttpResponseBase:
        response = await self.get_response(request)
        response = self.process_response(request, response)
        return response

    def process_response(self, request: HttpRequest, response: HttpResponseBase) -> HttpResponseBase:
        if (
            isinstance(response, StreamingHttpResponse)
            or not response.get("Content-Type", "").startswith("text/html")
            or is_exit(request)
        ):
            return response

        try:
            html = response.content.decode(response.charset)
        except UnicodeDecodeError as err:
            logger.warning(
                "Skipping lazy loading for %s, the response is not valid %s: %s",
                request.path,
                response.charset,
                err,
            )
            return response

        response.content = filter_post_content(html).encode(response.charset)
        if response.has_header("Content-Length"):
            response["Content-Length"] = str(len(response.content))

        trace(f"REWRITE RESPONSE {request.path}")
        return response
