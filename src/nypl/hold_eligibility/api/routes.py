import json

from flask import Response

from nypl import hold_eligibility
from nypl.hold_eligibility.api.app import app

ELIGIBILITY_MEDIA_TYPE = "application/ld+json"


@app.route("/api/v0.1/patrons/<patron_id>/hold-request-eligibility")
async def hold_request_eligibility(patron_id: str) -> Response:
    result = await app.checker.check_eligibility(patron_id)
    return Response(
        json.dumps(result.to_dict(), indent=2),
        status=200,
        mimetype=ELIGIBILITY_MEDIA_TYPE,
    )


@app.route("/version.json")
def application_version() -> dict[str, str | None]:
    return {
        "version": hold_eligibility.__version__,
        "commit": hold_eligibility.__commit__,
    }
