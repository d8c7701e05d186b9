from . import create_app

app = create_app()

if __name__ == "__main__":
    # Development server only; in production use a real WSGI server (gunicorn/uWSGI)
    app.run(debug=True)
