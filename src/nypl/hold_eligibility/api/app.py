import logging

import flask_babel
from flask_babel import Babel

from nypl.hold_eligibility.api.util.flask import EligibilityFlask
from nypl.hold_eligibility.core.app_server import ErrorHandler
from nypl.hold_eligibility.service.container import Services, create_container

app = EligibilityFlask(__name__)
app.config["BABEL_DEFAULT_LOCALE"] = "en"
babel = Babel(app)

# Patron ids are path segments, so we never want werkzeug's merge_slashes feature.
app.url_map.merge_slashes = False


from nypl.hold_eligibility.api import routes  # noqa


def initialize_application(container: Services | None = None) -> EligibilityFlask:
    with app.app_context(), flask_babel.force_locale("en"):
        # Load the application service container
        if container is None:
            container = create_container()

        # Initialize the application services container, this will make sure
        # that the logging system is initialized.
        container.init_resources()
        app.container = container

        # Initialize the applications error handler.
        error_handler = ErrorHandler(app)
        app.register_error_handler(Exception, error_handler.handle)

        # Sierra credentials are decrypted before any request is served.
        try:
            container.sierra.credentials()
        except Exception:
            logging.exception("Error loading Sierra credentials!")
            raise

        try:
            app.checker = container.checker()
        except Exception:
            logging.exception("Error instantiating eligibility checker!")
            raise
    return app
