import json

from django.http import HttpResponse, JsonResponse

from gtsim_core.domain.models import Notification
from gtsim_core.errors import handle_error

CRASH_MESSAGE = "应用程序发生错误，请刷新页面重试"

FALLBACK_PAGE = """<!doctype html>
<html lang="zh-CN">
<head><meta charset="utf-8"><title>出现错误</title></head>
<body>
  <h1>糟糕！出现了一些问题</h1>
  <p>应用程序遇到了意外错误。请尝试刷新页面。</p>
  <button onclick="window.location.reload()">刷新页面</button>
</body>
</html>
"""


class ErrorBoundaryMiddleware:
    """
    Last line of defense: any exception that escapes a view replaces the whole
    response with a reload page and a notification that never expires.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        handle_error(exception)
        notification = Notification(type="error", message=CRASH_MESSAGE, duration=None).to_dict()

        if "application/json" in request.headers.get("Accept", ""):
            return JsonResponse({"notification": notification}, status=500, json_dumps_params={"ensure_ascii": False})
        response = HttpResponse(FALLBACK_PAGE, status=500, content_type="text/html; charset=utf-8")
        response["X-Notification"] = json.dumps(notification)
        return response
