import os
import click
from flask import Flask

from workforce_api.extensions import db, migrate, jwt, cors, init_db
from workforce_api.common.errors import register_error_handlers
from workforce_api.config import DEV_JWT_SECRET, config_for_env
from workforce_api.models import load_all


def create_app(config_object=None):
    app = Flask(__name__)

    # Basic inline config (defaults)
    app.config.from_object(config_for_env())
    app.config["JWT_SECRET_KEY"] = os.getenv("JWT_SECRET_KEY", app.config["JWT_SECRET_KEY"])
    if os.getenv("DATABASE_URL"):
        app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv("DATABASE_URL")

    if config_object:
        try:
            app.config.from_object(config_object)
        except Exception as e:
            # Just log and continue with defaults
            app.logger.warning("Could not import config object %r: %s", config_object, e)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    if app.config.get("APP_ENV") == "production" and app.config["JWT_SECRET_KEY"] == DEV_JWT_SECRET:
        raise RuntimeError("JWT_SECRET_KEY must be set in production")

    # CORS: the SPA sends the session cookie, so credentials must be allowed
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    # Extensions
    init_db(app)
    register_error_handlers(app)
    jwt.init_app(app)
    migrate.init_app(app, db)

    from workforce_api.common.auth import register_jwt_callbacks
    register_jwt_callbacks(jwt)

    # Ensure models are loaded so metadata is complete
    with app.app_context():
        load_all()

    # Blueprints
    from workforce_api.blueprints.health import bp as health_bp
    from workforce_api.blueprints.auth import bp as auth_bp
    from workforce_api.blueprints.users import bp as users_bp
    from workforce_api.blueprints.tasks import bp as tasks_bp
    from workforce_api.blueprints.leaves import bp as leaves_bp
    from workforce_api.blueprints.attendance import bp as attendance_bp
    from workforce_api.blueprints.announcements import bp as announcements_bp
    from workforce_api.blueprints.dashboard import bp as dashboard_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(tasks_bp)
    app.register_blueprint(leaves_bp)
    app.register_blueprint(attendance_bp)
    app.register_blueprint(announcements_bp)
    app.register_blueprint(dashboard_bp)

    # ----------------- CLI COMMANDS -----------------

    @app.cli.command("seed-demo")
    def seed_demo():
        """Create tables and seed demo users, tasks, leaves and an announcement."""
        from workforce_api.seed_demo import run
        db.create_all()
        counts = run()
        click.echo(", ".join(f"{k}: {v}" for k, v in counts.items()))

    @app.cli.command("create-user")
    @click.option("--email", required=True)
    @click.option("--password", required=True)
    @click.option("--name", required=True)
    @click.option("--role", type=click.Choice(["admin", "hr", "employee"]), default="employee", show_default=True)
    @click.option("--department", default=None)
    @click.option("--position", default=None)
    def create_user(email, password, name, role, department, position):
        """Create a login user."""
        from workforce_api.models.user import User
        email = email.strip().lower()
        if User.query.filter_by(email=email).first():
            raise click.ClickException(f"user {email} already exists")
        u = User(name=name, email=email, role=role, department=department, position=position, skills=[])
        u.set_password(password)
        db.session.add(u)
        db.session.commit()
        click.echo(f"created user id={u.id} email={u.email} role={u.role}")

    return app
