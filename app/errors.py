import requests
from sqlalchemy.exc import SQLAlchemyError
from zeep.exceptions import Error as SoapError

from app.lichess import LichessError

# Failures of the platform API, the identity service or the player store.
# Routes answer all of them with the generic error page.
SERVICE_ERRORS = (requests.RequestException, SoapError, SQLAlchemyError, LichessError)
