"""
HTTP client for the campus portal API.

Every method returns decoded JSON; non-2xx responses raise PortalClientError
carrying the server's ``message``.
"""

import mimetypes
import httpx
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from cli.config import CLIConfig


class PortalClientError(Exception):
    """API call failed"""

    def __init__(self, status_code: int, message: str, code: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.code = code
        super().__init__(f"{status_code}: {message}")


class PortalClient:
    """Thin async wrapper over the REST surface"""

    def __init__(self, config: CLIConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.api_base_url,
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "PortalClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def _headers(self) -> Dict[str, str]:
        if self.config.auth_token:
            return {"Authorization": f"Bearer {self.config.auth_token}"}
        return {}

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.ConnectError:
            raise ConnectionError(f"Cannot connect to {self.config.server_url}. Is the server running?")

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            raise PortalClientError(
                response.status_code,
                body.get("message", response.reason_phrase),
                body.get("code"),
            )
        return response.json()

    # ==================== Auth ====================

    async def login(self, university_id: str, password: str) -> Dict[str, Any]:
        """Log in and remember the token on the config (caller saves it)"""
        data = await self._request(
            "POST", "/auth/login",
            json={"universityId": university_id, "password": password},
        )
        self.config.set_auth(data["token"], data["user"])
        return data

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/auth/me")

    # ==================== Student surface ====================

    async def sections(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/student/sections")

    async def files(self, section_id: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/student/files/{section_id}")

    async def news(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/student/news")

    async def search(self, query: str) -> List[Dict[str, Any]]:
        return await self._request("POST", "/student/assistant/search", json={"query": query})

    # ==================== Admin surface ====================

    async def admin_sections(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/admin/sections")

    async def create_section(self, name: str, icon: str, description: Optional[str] = None) -> Dict[str, Any]:
        return await self._request(
            "POST", "/admin/sections",
            json={"name": name, "icon": icon, "description": description},
        )

    async def delete_section(self, section_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/admin/sections/{section_id}")

    async def admin_files(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/admin/files")

    async def upload_file(self, path: Union[str, Path], section_id: str, file_name: Optional[str] = None) -> Dict[str, Any]:
        """Upload a local file into a section; the display name defaults to the file's name"""
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return await self._request(
            "POST", "/admin/files",
            data={"fileName": file_name or path.name, "section": section_id},
            files={"file": (path.name, path.read_bytes(), content_type)},
        )

    async def delete_file(self, file_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/admin/files/{file_id}")

    async def admin_news(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/admin/news")

    async def publish_news(self, title: str, content: str) -> Dict[str, Any]:
        return await self._request("POST", "/admin/news", json={"title": title, "content": content})

    async def delete_news(self, news_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/admin/news/{news_id}")

    async def knowledge_base(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/admin/knowledge-base")

    async def add_knowledge(self, question: str, answer: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/admin/knowledge-base",
            json={"question": question, "answer": answer},
        )

    async def delete_knowledge(self, entry_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/admin/knowledge-base/{entry_id}")

    async def students(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/admin/students")

    async def create_student(self, full_name: str, university_id: str, password: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/admin/students",
            json={"fullName": full_name, "universityId": university_id, "password": password},
        )

    async def delete_student(self, student_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/admin/students/{student_id}")
