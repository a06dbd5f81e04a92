from otp_engine import create_app

# gunicorn -c gunicorn.conf.py wsgi:app
app = create_app()
