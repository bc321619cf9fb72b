# 📄 File: plantscope/modules/plant_lookup/application/queries/weather_queries.py
# 🧭 Purpose (Layman Explanation):
# Describes the question "what is the weather like at this spot right now"
# 🔄 Connected Modules / Calls From:
# application.handlers.query_handlers, presentation.api.v1.weather

from pydantic import BaseModel, Field

from ...domain.models.subject import SubjectKind, SubjectQuery


class CurrentWeatherQuery(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def to_subject(self) -> SubjectQuery:
        # weather is keyed by place, the name only labels log lines
        return SubjectQuery(
            kind=SubjectKind.PLANT,
            name=f"{self.latitude},{self.longitude}",
            latitude=self.latitude,
            longitude=self.longitude
        )
