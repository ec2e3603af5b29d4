import logging
import sys
import urllib.parse

from nypl.hold_eligibility.api.app import initialize_application


def run(url=None):
    base_url = url or "http://localhost:3003/"
    scheme, netloc, path, parameters, query, fragment = urllib.parse.urlparse(base_url)
    if ":" in netloc:
        host, port = netloc.split(":")
        port = int(port)
    else:
        host = netloc
        port = 80

    app = initialize_application()

    logging.info("Starting app on %s:%s", host, port)

    sslContext = "adhoc" if scheme == "https" else None
    app.run(debug=True, host=host, port=port, threaded=True, ssl_context=sslContext)


if __name__ == "__main__":
    url = sys.argv.pop() if len(sys.argv) > 1 else None
    run(url)
