from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_wakeup_service
from application.services import WakeupService
from config.settings import Settings, get_settings

router = APIRouter(prefix='/api', tags=['ops'])


@router.post('/wakeup', summary='Trigger the price refresh job, at most once per cooldown window')
async def wakeup(
	service: Annotated[WakeupService, Depends(get_wakeup_service)],
) -> JSONResponse:
	outcome = await service.wake()
	return JSONResponse(status_code=outcome.status_code, content=outcome.body)


@router.get('/config', summary='Public client configuration')
async def public_config(
	settings: Annotated[Settings, Depends(get_settings)],
) -> JSONResponse:
	return JSONResponse(
		content=settings.public_config(),
		headers={'Access-Control-Allow-Origin': '*'},
	)
