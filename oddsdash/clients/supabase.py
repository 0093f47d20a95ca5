# oddsdash/clients/supabase.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from ..core.http import HttpRetryingClient


class SupabaseError(RuntimeError):
    pass


class SupabaseClient:
    """
    Thin wrapper over Supabase PostgREST remote procedure calls:

      POST {url}/rest/v1/rpc/get_games_for_dashboard
           {p_sport, p_season, p_conference, p_sportsbook, p_limit}
      POST {url}/rest/v1/rpc/get_dashboard_stats
           {p_sport, p_season}

    Both functions are defined in the dashboard database; this client only
    forwards parameters and returns decoded JSON.
    """

    # ------------ lifecycle ------------
    def __init__(self, url: str, api_key: str, timeout: float = 10.0,
                 transport: Optional[httpx.BaseTransport] = None):
        self._http = HttpRetryingClient(
            base_url=url.rstrip("/"),
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    # ------------ low-level helpers ------------
    def rpc(self, function: str, params: Dict[str, Any]) -> Any:
        url = f"/rest/v1/rpc/{function}"
        try:
            resp = self._http.post(url, json=params)
        except httpx.HTTPStatusError as e:
            # include server body to help diagnose quickly
            body = e.response.text
            raise SupabaseError(f"RPC {function} -> {e.response.status_code}: {body}") from e
        except httpx.HTTPError as e:
            raise SupabaseError(f"RPC {function} failed: {e}") from e
        try:
            return resp.json()
        except ValueError as e:
            raise SupabaseError(f"RPC {function} returned non-JSON body") from e

    # ------------ dashboard procedures ------------
    def games_for_dashboard(
        self,
        sport: str,
        season: Optional[int] = None,
        conference: Optional[str] = None,
        sportsbook: Optional[str] = None,
        limit: int = 500,
    ) -> List[Dict[str, Any]]:
        data = self.rpc("get_games_for_dashboard", {
            "p_sport": sport,
            "p_season": season,
            "p_conference": conference,
            "p_sportsbook": sportsbook,
            "p_limit": limit,
        })
        if data is None:
            return []
        if not isinstance(data, list):
            raise SupabaseError("get_games_for_dashboard returned unexpected shape")
        return data

    def dashboard_stats(self, sport: str, season: Optional[int] = None) -> Dict[str, Any]:
        data = self.rpc("get_dashboard_stats", {"p_sport": sport, "p_season": season})
        # PostgREST wraps scalar-returning functions in a one-element list
        if isinstance(data, list) and len(data) == 1:
            data = data[0]
        return data or {}
