import logging
import os

from flask import Flask, current_app, flash, redirect, render_template, request, url_for

from .config import load_config
from .errors import DecodeError
from .params import ScryptParams
from .simple import create_password_hash, verify_password


def create_app(config=None, store=None) -> Flask:
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)
    if not app.config.get('SECRET_KEY'):
        app.secret_key = os.urandom(24)

    # fail at startup, not on the first register
    app.config['SCRYPT_PARAMS'] = ScryptParams(app.config['SCRYPT_LOG_N'], app.config['SCRYPT_R'],
                                               app.config['SCRYPT_P'], app.config['SCRYPT_MAX_MEMORY'])

    if store is None:
        from .userstore import UserStore
        store = UserStore(app.config['DB_CONN_STR'])
    app.extensions['user_store'] = store

    # ---------- Routes ----------
    @app.route('/')
    def index():
        return render_template('index.html')

    @app.route('/register', methods=['GET', 'POST'])
    def register():
        if request.method == 'POST':
            username = request.form.get('username', '').strip()
            password = request.form.get('password', '')
            if not username or not password:
                flash('Ploteso username dhe password.', 'warning')
                return redirect(url_for('register'))

            if store.get_user(username):
                flash('Username ekziston - zgjedh nje tjeter.', 'danger')
                return redirect(url_for('register'))

            password_hash = create_password_hash(password, current_app.config['SCRYPT_PARAMS'])
            store.save_user(username, password_hash)
            app.logger.info('registered user %s', username)
            flash('Regjistrim i suksesshëm. Mund të logohesh tani.', 'success')
            return redirect(url_for('login'))

        return render_template('register.html')

    @app.route('/login', methods=['GET', 'POST'])
    def login():
        if request.method == 'POST':
            username = request.form.get('username', '').strip()
            password = request.form.get('password', '')

            user = store.get_user(username)
            if not user:
                flash('Përdoruesi nuk u gjet.', 'danger')
                return redirect(url_for('login'))

            _, _, stored_hash = user
            try:
                ok = verify_password(password, stored_hash, current_app.config['SCRYPT_MAX_MEMORY'])
            except DecodeError as e:
                app.logger.info('stored hash for %s rejected: %s', username, e)
                ok = False

            if ok:
                flash(f'Sukses! Ju jeni kyçur si {username}.', 'success')
                return redirect(url_for('index'))
            flash('Fjalëkalim i pasaktë.', 'danger')
            return redirect(url_for('login'))

        return render_template('login.html')

    @app.route('/users')
    def users():
        rows = store.list_users()
        return render_template('users.html', users=rows)

    return app


def main():
    logging.basicConfig(level=logging.INFO)
    app = create_app()
    app.extensions['user_store'].init_db()
    app.run(debug=os.environ.get('FLASK_DEBUG') == '1')


if __name__ == '__main__':
    main()
