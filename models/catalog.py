from datetime import datetime

from models._base import db


class Division(db.Model):
    __tablename__ = "divisions"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(120), nullable=False, unique=True, index=True)
    description = db.Column(db.Text, default="")
    icon_name = db.Column(db.String(50), default="Package")
    order_index = db.Column(db.Integer, nullable=False, default=0)

    products = db.relationship("Product", back_populates="division", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "icon_name": self.icon_name,
            "order_index": self.order_index,
        }


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    division_id = db.Column(db.Integer, db.ForeignKey("divisions.id"), nullable=True, index=True)
    name = db.Column(db.String(150), nullable=False, index=True)
    model_number = db.Column(db.String(80), nullable=False, default="")
    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)
    short_description = db.Column(db.String(300), default="")
    long_description = db.Column(db.Text, default="")
    main_image = db.Column(db.String(255), default="")
    category_tag = db.Column(db.String(80), default="")
    technical_specs = db.Column(db.JSON, nullable=False, default=dict)
    brochure_url = db.Column(db.String(255))
    video_url = db.Column(db.String(255))
    warranty_info = db.Column(db.String(200))
    is_published = db.Column(db.Boolean, nullable=False, default=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.now, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    division = db.relationship("Division", back_populates="products")

    def to_dict(self):
        return {
            "id": self.id,
            "division_id": self.division_id,
            "division": self.division.name if self.division else "",
            "name": self.name,
            "model_number": self.model_number,
            "slug": self.slug,
            "short_description": self.short_description,
            "long_description": self.long_description,
            "main_image": self.main_image,
            "category_tag": self.category_tag,
            "technical_specs": dict(self.technical_specs or {}),
            "brochure_url": self.brochure_url,
            "video_url": self.video_url,
            "warranty_info": self.warranty_info,
            "is_published": self.is_published,
            "created_at": self.created_at.strftime("%Y-%m-%d") if self.created_at else "",
        }
