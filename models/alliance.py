from datetime import datetime

from models._base import db


class Alliance(db.Model):
    """Manufacturer partner shown in the public partner directory."""
    __tablename__ = "alliances"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(150), nullable=False)
    slug = db.Column(db.String(160), nullable=False, unique=True, index=True)
    category = db.Column(db.String(80), nullable=False, index=True)
    country = db.Column(db.String(80), default="")
    specialization = db.Column(db.String(150), default="")
    description = db.Column(db.Text, default="")
    logo_url = db.Column(db.String(255), default="")
    website_url = db.Column(db.String(255))
    certifications = db.Column(db.JSON, nullable=False, default=list)  # e.g. ["ISO 13485", "CE"]
    is_featured = db.Column(db.Boolean, nullable=False, default=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.now)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "category": self.category,
            "country": self.country,
            "specialization": self.specialization,
            "description": self.description,
            "logo_url": self.logo_url,
            "website_url": self.website_url,
            "certifications": list(self.certifications or []),
            "is_featured": self.is_featured,
            "created_at": self.created_at.strftime("%Y-%m-%d") if self.created_at else "",
        }
