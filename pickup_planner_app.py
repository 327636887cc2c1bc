from __future__ import annotations

from planner.config import PlannerAppConfig, get_secret
from planner.app import run_planner_app


def main() -> None:
    """Pickup planner entry point (`streamlit run pickup_planner_app.py`)."""
    cfg = PlannerAppConfig(
        title='Planificador de recogidas',
        default_lang='es',
        nextmv_proxy_url=get_secret('NEXTMV_PROXY_URL', section='nextmv'),
    )
    run_planner_app(cfg=cfg)


if __name__ == '__main__':
    main()
