"""Mock narrative service returning seed-stable canned text"""

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Any, Dict
import os

app = FastAPI(title="Mock Narrative Server", version="1.0.0")

# Number of upcoming requests answered with 503, to exercise client retries
app.state.overload_remaining = int(os.getenv("MOCK_OVERLOAD_FAILURES", "0"))

_OPENERS = [
    "Here is how your numbers add up.",
    "Let's walk through what this means for you.",
    "A quick look at where you stand.",
]


class NarrativeRequest(BaseModel):
    kind: str
    context: Dict[str, Any]
    seed: str


@app.get("/health")
def health(): return {"status": "ok"}


@app.post("/v1/narratives")
def create_narrative(body: NarrativeRequest):
    if app.state.overload_remaining > 0:
        app.state.overload_remaining -= 1
        raise HTTPException(status_code=503, detail="model overloaded")

    opener = _OPENERS[sum(map(ord, body.seed)) % len(_OPENERS)]
    ctx = body.context
    if body.kind == "life_event_plan":
        if ctx.get("is_feasible"):
            text = f"{opener} Saving {ctx['monthly_savings']} a month gets you to {ctx['goal']} on schedule."
        else:
            text = f"{opener} Stretching the goal to {ctx['minimum_feasible_timeframe']} keeps it affordable."
    elif body.kind == "health_score":
        text = f"{opener} Your financial health score is {ctx['score']}/100."
    else:
        raise HTTPException(status_code=400, detail=f"unknown narrative kind {body.kind}")
    return {"text": text, "seed": body.seed}
