"""Turkish national identity check (NVI KPS public SOAP service)."""

from zeep import Client

# Dotted/dotless i differ from the default Unicode mapping in Turkish.
_TR_UPPER = str.maketrans({'i': 'İ', 'ı': 'I'})


def turkish_upper(text):
    return text.translate(_TR_UPPER).upper()


class GovIdClient:
    def __init__(self, app=None):
        self.wsdl = None
        self._client = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.wsdl = app.config.get('GOV_WSDL')
        self._client = None
        app.extensions['gov_id'] = self

    @property
    def client(self):
        if self._client is None:
            self._client = Client(self.wsdl)
        return self._client

    def verify(self, national_id, first_name, last_name, birth_year):
        """
        Ask the registry whether the id belongs to the named person born in
        `birth_year`. Transport and SOAP faults propagate to the caller.
        """
        status = self.client.service.TCKimlikNoDogrula(
            TCKimlikNo=int(national_id),
            Ad=turkish_upper(first_name),
            Soyad=turkish_upper(last_name),
            DogumYili=int(birth_year),
        )
        return bool(status)
