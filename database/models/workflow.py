from sqlalchemy import Column, Text, Boolean, Integer, TIMESTAMP

from .base import Base, new_id, utcnow


class WorkflowStage(Base):
    """One step of the thesis workflow, ordered by position."""
    __tablename__ = 'workflow_stages'

    id = Column(Text, primary_key=True, default=new_id)
    code = Column(Text, nullable=False, unique=True)
    label = Column(Text, nullable=False)
    description = Column(Text)
    position = Column(Integer, nullable=False)
    active = Column(Boolean, nullable=False, default=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


DEFAULT_STAGES = [
    {'code': 'DEPOT_SUJET', 'label': 'Dépôt du sujet', 'position': 1,
     'description': 'Soumission de la proposition de sujet de mémoire'},
    {'code': 'VALIDATION_SUJET', 'label': 'Validation du sujet', 'position': 2,
     'description': 'Validation du sujet par le promoteur ou la direction'},
    {'code': 'DEPOT_PLAN', 'label': 'Dépôt du plan', 'position': 3,
     'description': 'Soumission du plan détaillé du mémoire'},
    {'code': 'FEEDBACK_PLAN', 'label': 'Feedback sur le plan', 'position': 4,
     'description': 'Retour du promoteur sur le plan soumis'},
    {'code': 'DEPOT_INTERMEDIAIRE', 'label': 'Dépôt intermédiaire', 'position': 5,
     'description': 'Soumission de la version intermédiaire du mémoire'},
    {'code': 'DEPOT_FINAL', 'label': 'Dépôt final', 'position': 6,
     'description': 'Soumission de la version finale du mémoire'},
]
