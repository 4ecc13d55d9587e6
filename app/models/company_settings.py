from app.extensions import db


class CompanySettings(db.Model):
    __tablename__ = "company_settings"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, default="")
    address = db.Column(db.String(255), nullable=True)
    city = db.Column(db.String(128), nullable=True)
    country = db.Column(db.String(128), nullable=True)
    phone = db.Column(db.String(64), nullable=True)
    email = db.Column(db.String(255), nullable=True)
    website = db.Column(db.String(255), nullable=True)
    capital = db.Column(db.String(64), nullable=True)
    rc = db.Column(db.String(32), nullable=True)
    nif = db.Column(db.String(32), nullable=True)
    nis = db.Column(db.String(32), nullable=True)
    ai = db.Column(db.String(32), nullable=True)

    def __repr__(self):
        return f"<CompanySettings {self.name}>"
