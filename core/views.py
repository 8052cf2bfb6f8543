"""Views for the core app.

The only endpoint is a stateless JSON adapter around the deviation chart
renderer: records arrive in the request body and the draw list is returned.
Nothing is persisted.
"""

from __future__ import annotations

import json
import logging

from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt

from core.charting.codec import ScoreRecordPayloadError, decode_score_records, encode_draw_list
from core.charting.render import render_deviation_chart

logger = logging.getLogger(__name__)


@csrf_exempt
def deviation_chart_api(request: HttpRequest) -> JsonResponse:
    """Render the deviation trend chart for posted score records.

    The request body is a JSON object with `records` (list of score record
    documents) and an optional `grade` label.

    Returns:
        JSON with `renderable` and `chart` (the encoded draw list, or null when
        the chart is suppressed). Malformed payloads yield a 400 response.
    """

    if request.method != "POST":
        return JsonResponse({"ok": False, "error": "POST required."}, status=405)

    try:
        body = json.loads(request.body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JsonResponse({"ok": False, "error": "Request body must be JSON."}, status=400)
    if not isinstance(body, dict):
        return JsonResponse({"ok": False, "error": "Request body must be a JSON object."}, status=400)

    raw_records = body.get("records", [])
    if isinstance(raw_records, list) and len(raw_records) > settings.SCORE_CHART_MAX_RECORDS:
        return JsonResponse(
            {"ok": False, "error": f"Too many records (>{settings.SCORE_CHART_MAX_RECORDS})."},
            status=400,
        )

    try:
        records = decode_score_records(raw_records, tz=timezone.get_current_timezone())
    except ScoreRecordPayloadError as exc:
        logger.info("Rejected deviation chart payload: %s", exc)
        return JsonResponse({"ok": False, "error": str(exc)}, status=400)

    grade = body.get("grade")
    draw_list = render_deviation_chart(
        records,
        grade=str(grade) if grade else None,
        date_label_format=settings.SCORE_CHART_DATE_LABEL_FORMAT,
    )
    if draw_list is None:
        return JsonResponse({"ok": True, "renderable": False, "chart": None})
    return JsonResponse({"ok": True, "renderable": True, "chart": encode_draw_list(draw_list)})
