from flask import Flask, request, redirect, url_for, Blueprint, Response
import logging
import secrets

from .api import HealthCheckServices, get_services, remember_inputs, session_controller
from .api.report import router as api_router
from .config import Settings
from .errors import ControllerBusyError, FieldError
from .services.catalogue import load_form_catalogue
from .services.controller import ControllerRegistry, FormController
from .services.form_view import render_form
from .services.llm import ReportRequester
from .services.report_view import render_report

logger = logging.getLogger(__name__)


main = Blueprint('main', __name__)


def _html(body: str, status: int = 200) -> Response:
    return Response(body, status=status, mimetype='text/html')


@main.get("/health")
def healthcheck():
    """Readiness marker for monitoring."""
    settings = get_services().settings
    return {"status": "ok", "model": settings.model, "configured": bool(settings.api_key)}


@main.route("/", methods=['GET'])
def index():
    services = get_services()
    _, controller = session_controller()
    if controller.report is not None:
        return _html(render_report(controller.report, services.settings.report_title, reset_url=url_for("main.reset")))
    return _html(render_form(
        services.catalogue,
        controller.inputs.to_wire(),
        error=controller.error,
        generate_url=url_for("main.generate"),
    ))


@main.route("/generate", methods=['POST'])
def generate():
    services = get_services()
    _, controller = session_controller()
    generate_url = url_for("main.generate")

    # Every catalogue field is posted, blank ones included, so clearing a value works.
    posted = {spec.name: request.form.get(spec.name, '')
              for spec in services.catalogue.fields() if spec.name in request.form}
    try:
        controller.set_fields(posted)
    except FieldError as e:
        logger.info("Rejected form value: %s", e)
        spec = services.catalogue.index().get(e.name)
        label = spec.label if spec else e.name
        page = render_form(services.catalogue, {**controller.inputs.to_wire(), **posted},
                           error=f"{label}: valore non valido.", generate_url=generate_url)
        return _html(page, 400)
    remember_inputs(controller)

    try:
        report = controller.generate()
    except ControllerBusyError as e:
        page = render_form(services.catalogue, controller.inputs.to_wire(),
                           error=str(e), generate_url=generate_url)
        return _html(page, 409)

    # Answer in this response: the next request may land on another instance.
    if report is None:
        page = render_form(services.catalogue, controller.inputs.to_wire(),
                           error=controller.error, generate_url=generate_url)
        return _html(page, 502)
    return _html(render_report(report, services.settings.report_title, reset_url=url_for("main.reset")))


@main.route("/reset", methods=['POST'])
def reset():
    _, controller = session_controller()
    controller.reset()
    return redirect(url_for("main.index"))


def create_app(settings=None, requester=None, catalogue=None) -> Flask:
    """Build the Flask app. Collaborators may be injected; otherwise they come from ``settings``."""
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    if settings.secret_key:
        app.config["SECRET_KEY"] = settings.secret_key
    else:
        logger.warning("SECRET_KEY not set; using a random key, form sessions will not survive a restart")
        app.config["SECRET_KEY"] = secrets.token_hex(32)

    requester = requester or ReportRequester.from_settings(settings)
    catalogue = catalogue or load_form_catalogue()
    registry = ControllerRegistry(lambda inputs: FormController(requester, inputs), capacity=settings.max_sessions)
    app.extensions["healthcheck"] = HealthCheckServices(
        settings=settings,
        requester=requester,
        catalogue=catalogue,
        registry=registry,
    )

    app.register_blueprint(main)
    app.register_blueprint(api_router, url_prefix='/api')
    return app


__all__ = ["create_app"]
