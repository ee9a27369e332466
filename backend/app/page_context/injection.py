"""
Context injection at browser call sites.

After every command that can change the page URL (navigate, act, new tab)
the caller asks the injector for context and attaches it to the command
result as "pageContext". The injector, not the resolver, honours the
BROWSER_CONTEXT_INJECTION toggle.
"""

import logging
from typing import Any, Dict, Optional

from playwright.async_api import Page

from .formatter import format_for_prompt
from .resolver import BaseContextResolver
from .settings import context_injection_enabled

logger = logging.getLogger(__name__)


class ContextInjector:
    """Attaches resolved page context to browser command results"""

    def __init__(self, resolver: BaseContextResolver, enabled: Optional[bool] = None):
        self.resolver = resolver
        self.enabled = context_injection_enabled() if enabled is None else enabled

    def context_for_url(self, url: Optional[str]) -> Optional[str]:
        if not self.enabled or not url:
            return None
        return self.resolver.resolve(url)

    def _attach(self, result: Dict[str, Any], url: Optional[str]) -> Dict[str, Any]:
        context = self.context_for_url(url)
        if context:
            result['pageContext'] = context
        return result

    def after_navigation(self, requested_url: str, final_url: str) -> Dict[str, Any]:
        """Result for a navigation; context is resolved for the post-redirect URL"""
        if final_url != requested_url:
            message = f"Navigated to {requested_url} → redirected to {final_url}"
        else:
            message = f"Successfully navigated to {requested_url}"
        return self._attach({'success': True, 'message': message, 'url': final_url}, final_url)

    def after_action(self, action: str, url_before: str, url_after: str) -> Dict[str, Any]:
        """Result for a page action; context only when the action navigated"""
        navigated = url_after != url_before
        if navigated:
            message = f"Performed action: {action} → navigated to {url_after}"
        else:
            message = f"Successfully performed action: {action}"
        result = {'success': True, 'message': message, 'url': url_after}
        if not navigated:
            return result
        return self._attach(result, url_after)

    def after_new_tab(self, url: Optional[str] = None) -> Dict[str, Any]:
        message = f"Opened new tab and navigated to {url}" if url else "Opened new tab"
        return self._attach({'success': True, 'message': message, 'url': url}, url)

    async def navigate(self, page: Page, url: str) -> Dict[str, Any]:
        """Navigate a Playwright page and return the result with page context"""
        try:
            await page.goto(url)
            return self.after_navigation(url, page.url)
        except Exception as e:
            logger.error(f"Navigation to {url} failed: {e}")
            return {'success': False, 'error': str(e)}

    async def current_context(self, page: Page) -> Optional[str]:
        return self.context_for_url(page.url)


def format_payload_context(payload: Dict[str, Any]) -> Optional[str]:
    """Prompt-ready context for a command result, if it carries any"""
    context = payload.get('pageContext')
    if not context:
        return None
    url = payload.get('url', '')
    return format_for_prompt(context, url)
