from __future__ import annotations

import asyncio
import contextlib
import json
from typing import List, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from fleet import BankConfig, ElevatorBank

EVENTS = ("gossip", "bid", "accepted", "rejected", "move")


class FloorRangeModel(BaseModel):
    min: int = 0
    max: int = 10


class GossipModel(BaseModel):
    fanout: int = 2


class BankSettings(BaseModel):
    elevator_count: int = 2
    floor_range: FloorRangeModel = FloorRangeModel()
    gossip: GossipModel = GossipModel()
    random_seed: Optional[int] = None


class FloorRequest(BaseModel):
    floor: int
    direction: str = "rest"
    priority: int = 0


class BankManager:
    def __init__(self, config: Optional[BankConfig] = None) -> None:
        self.clients: Set[WebSocket] = set()
        self.events: Optional["asyncio.Queue[dict]"] = None
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()
        self.bank = self._build_bank(config or BankConfig())

    def _build_bank(self, config: BankConfig) -> ElevatorBank:
        bank = ElevatorBank.from_config(config)
        for event in EVENTS:
            bank.on_event(event, self._make_recorder(event))
        return bank

    def _make_recorder(self, event: str):
        def record(payload: object) -> None:
            if self.events is not None:
                self.events.put_nowait({"event": event, "payload": payload})

        return record

    async def start(self) -> None:
        if self._task is None:
            self.events = asyncio.Queue()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
            self.events = None

    async def _run(self) -> None:
        while True:
            payload = await self.events.get()
            await self.broadcast(payload)

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        return {"bank": self.bank.snapshot()}

    async def configure(self, config: BankConfig) -> dict:
        async with self._lock:
            self.bank = self._build_bank(config)
            return self.current_state()

    async def submit(self, floor: int, direction: str, priority: int) -> dict:
        async with self._lock:
            accepted = self.bank.submit(floor, direction, priority)
            state = self.current_state()
            state["accepted"] = accepted
            return state

    async def drain(self) -> List[List[str]]:
        async with self._lock:
            return self.bank.drain_all()


manager = BankManager()
app = FastAPI(title="LiftGossip Bank API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup() -> None:
    await manager.start()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await manager.stop()


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.post("/bank")
async def configure_bank(settings: BankSettings) -> dict:
    try:
        config = BankConfig.from_dict(settings.model_dump())
        return await manager.configure(config)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/requests")
async def submit_request(request: FloorRequest) -> dict:
    try:
        return await manager.submit(request.floor, request.direction, request.priority)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/drain")
async def drain_bank() -> dict:
    traces = await manager.drain()
    return {"traces": traces, **manager.current_state()}


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
