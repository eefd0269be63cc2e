from flask import Blueprint

main_bp = Blueprint('main', __name__)
auth_bp = Blueprint('auth', __name__)
verification_bp = Blueprint('verification', __name__)
admin_bp = Blueprint('admin', __name__)
