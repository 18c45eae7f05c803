from pydantic import BaseModel, ConfigDict, Field


class AnalysisRequest(BaseModel):
    """Body of POST /api/analyze.

    Fields are optional so that absent or null values reach the analyzer and are
    reported together instead of failing request validation one by one.
    """
    model_config = ConfigDict(populate_by_name=True)

    resume: str | None = Field(None, description="Plain text resume content")
    job_description: str | None = Field(None, alias="jobDescription", description="Job description text")
