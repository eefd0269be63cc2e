from app import create_app
import os

app = create_app()


if __name__ == "__main__":
    # Bind to 0.0.0.0 to accept connections from outside the container
    port = int(os.environ.get('APP_PORT', 5051))
    app.logger.info(f'Listening on port {port}')
    app.run(host='0.0.0.0', port=port, debug=os.environ.get('FLASK_DEBUG') == '1')
