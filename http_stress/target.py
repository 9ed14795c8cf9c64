"""
Local FastAPI target for trying the tool without a real backend.

``/ping`` answers every common method; ``delay_ms`` adds latency and
``status`` picks the response code, so failure and overlap behaviour can be
reproduced on a laptop:

    stressctl target --port 8080 &
    stressctl run -u "http://127.0.0.1:8080/ping?delay_ms=50" -n 20 -c 5
"""

from __future__ import annotations

from asyncio import sleep

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

app = FastAPI(title="stressctl ping target")


@app.api_route("/ping", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def ping(
    delay_ms: int = Query(0, ge=0, le=60_000),
    status: int = Query(200, ge=200, le=599),
) -> JSONResponse:
    if delay_ms:
        await sleep(delay_ms / 1000)
    return JSONResponse({"pong": True}, status_code=status)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
