# charity_backend/run.py
from charity_backend.app_factory import create_app
from charity_backend.logging_config import setup_logging

logger = setup_logging()


def main():
    app = create_app()
    port = app.config['PORT']
    logger.info(f"Server running on http://localhost:{port}")
    app.run(host='0.0.0.0', port=port)


if __name__ == '__main__':
    main()
