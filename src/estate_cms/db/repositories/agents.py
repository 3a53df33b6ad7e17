from __future__ import annotations

from estate_cms.db.models import Agent
from estate_cms.db.repositories.base import SqlStore


class AgentRepo(SqlStore[Agent]):
    model = Agent
