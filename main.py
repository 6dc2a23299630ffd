import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth import AuthService, get_auth_service, require_session
from catalog import AdminCatalogService, CatalogQueryService
from config import Settings
from dashboard import DashboardService
from database import PRODUCTS, Database
from errors import StorefrontError, StoreError
from logging_config import setup_logging
from orders import OrderService
from schemas import Category, CheckoutIn, LoginIn, SignupIn, StatusUpdateIn
from seed import seed_sample_data

logger = logging.getLogger("storefront.api")


# ---------- Dependencies ----------

def get_catalog(request: Request) -> CatalogQueryService:
    return request.app.state.catalog


def get_admin_catalog(request: Request) -> AdminCatalogService:
    return request.app.state.admin_catalog


def get_orders(request: Request) -> OrderService:
    return request.app.state.orders


def get_dashboard(request: Request) -> DashboardService:
    return request.app.state.dashboard


# ---------- Error handlers ----------

def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if not errors:
        return _error_response(400, "Invalid request data.")
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(loc) or "body"
    return _error_response(400, f"Invalid request data: {field} {first.get('msg', 'is invalid').lower()}.")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(500, "Internal server error.")


# ---------- App factory ----------

def create_app(settings=Settings, database: Optional[Database] = None) -> FastAPI:
    """Build the API around ``database``; connects to ``settings.MONGO_URI`` when none is given."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        store = database or Database(
            settings.MONGO_URI, settings.DATABASE_NAME, timeout_ms=settings.MONGO_TIMEOUT_MS
        )
        # Connection failure aborts startup; there is no degraded mode.
        store.connect()
        seed_sample_data(store)

        app.state.database = store
        app.state.auth_service = AuthService(
            store,
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            ttl_seconds=settings.TOKEN_TTL_SECONDS,
        )
        app.state.catalog = CatalogQueryService(store)
        app.state.admin_catalog = AdminCatalogService(store)
        app.state.orders = OrderService(store)
        app.state.dashboard = DashboardService(store)
        logger.info("Storefront API ready")
        yield
        if database is None:
            store.close()

    app = FastAPI(title="Storefront API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    prefix = settings.API_PREFIX

    # ---------- Basic Routes ----------

    @app.get("/")
    def read_root():
        return {"message": "Storefront backend running"}

    @app.get(f"{prefix}/health")
    def health(request: Request):
        store: Database = request.app.state.database
        status = {"backend": "running", "database": "unavailable"}
        try:
            store.collection(PRODUCTS).estimated_document_count()
            status["database"] = "connected"
        except (PyMongoError, StoreError) as e:
            logger.warning("Health check could not reach the database: %s", e)
        return status

    # ---------- Auth Routes ----------

    @app.post(f"{prefix}/signup", status_code=201)
    def signup(payload: SignupIn, auth: AuthService = Depends(get_auth_service)):
        return auth.signup(payload.name, payload.email, payload.password).signup_payload()

    @app.post(f"{prefix}/login")
    def login(payload: LoginIn, auth: AuthService = Depends(get_auth_service)):
        return auth.login(payload.email, payload.password).login_payload()

    @app.post(f"{prefix}/admin/login")
    def admin_login(payload: LoginIn, auth: AuthService = Depends(get_auth_service)):
        return auth.admin_login(payload.email, payload.password).login_payload()

    # ---------- Catalog Routes ----------

    def _category_route(category: Category):
        def list_category(catalog: CatalogQueryService = Depends(get_catalog)) -> List[dict]:
            return catalog.list_by_category(category.label)
        list_category.__name__ = f"list_{category.slug}"
        return list_category

    for category in Category:
        app.add_api_route(f"{prefix}/{category.slug}", _category_route(category), methods=["GET"])

    @app.get(f"{prefix}/products")
    def list_products(catalog: CatalogQueryService = Depends(get_catalog)):
        return catalog.list_all()

    @app.get(f"{prefix}/products/{{product_id}}")
    def get_product(product_id: str, catalog: CatalogQueryService = Depends(get_catalog)):
        return catalog.get_product(product_id)

    @app.post(f"{prefix}/products", status_code=201, dependencies=[Depends(require_session)])
    def create_product(
        fields: Dict[str, Any] = Body(...),
        admin: AdminCatalogService = Depends(get_admin_catalog),
    ):
        return admin.create_product(fields)

    @app.put(f"{prefix}/products/{{product_id}}", dependencies=[Depends(require_session)])
    def update_product(
        product_id: str,
        fields: Dict[str, Any] = Body(...),
        admin: AdminCatalogService = Depends(get_admin_catalog),
    ):
        return admin.update_product(product_id, fields)

    @app.delete(f"{prefix}/products/{{product_id}}", dependencies=[Depends(require_session)])
    def delete_product(
        product_id: str,
        admin: AdminCatalogService = Depends(get_admin_catalog),
    ):
        return admin.delete_product(product_id)

    # ---------- Order Routes ----------

    @app.post(f"{prefix}/orders", status_code=201)
    def place_order(payload: CheckoutIn, orders: OrderService = Depends(get_orders)):
        order_id = orders.place_order(payload.customerName, payload.items, payload.grandTotal)
        return {"message": "Order placed successfully!", "orderId": order_id}

    @app.get(f"{prefix}/orders", dependencies=[Depends(require_session)])
    def list_orders(
        orders: OrderService = Depends(get_orders),
    ):
        return orders.list_orders()

    @app.put(f"{prefix}/orders/{{order_id}}", dependencies=[Depends(require_session)])
    def update_order_status(
        order_id: str,
        payload: StatusUpdateIn,
        orders: OrderService = Depends(get_orders),
    ):
        order = orders.update_status(order_id, payload.status)
        return {"message": "Order status updated.", "order": order}

    # ---------- Dashboard ----------

    @app.get(f"{prefix}/stats", dependencies=[Depends(require_session)])
    def stats(
        dashboard: DashboardService = Depends(get_dashboard),
    ):
        return dashboard.compute_stats().model_dump()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=Settings.HOST, port=Settings.PORT)
