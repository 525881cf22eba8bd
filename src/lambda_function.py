from healthcheck import create_app
import serverless_wsgi as serverless_wsgi

app = create_app()


def handler(event, context):
    # API Gateway / function URL events are translated to WSGI requests
    return serverless_wsgi.handle_request(app, event, context)
