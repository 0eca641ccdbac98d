from cmms.data.entity_base import EntityBase
from cmms import db


class ServiceTeam(EntityBase):
    __tablename__ = 'service_teams'

    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)

    def __repr__(self):
        return f'<ServiceTeam {self.name}>'
