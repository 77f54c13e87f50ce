import logging
import os
from flask import Flask
from flask_cors import CORS
from extensions import limiter
from intake import intake_bp

ALLOWED_ORIGINS = [
    'http://localhost:3000',
    'http://localhost:5173',
]


def create_app() -> Flask:
    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = 20 * 1024 * 1024  # 20 MB upload limit

    CORS(app, resources={r"/api/*": {"origins": ALLOWED_ORIGINS}})

    limiter.init_app(app)

    app.register_blueprint(intake_bp)
    return app


app = create_app()

if __name__ == '__main__':
    logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO'))
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=False)
