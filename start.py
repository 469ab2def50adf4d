#!/usr/bin/env python
"""
Chat Completion Proxy Launcher
Runs pre-flight checks, then serves app.main:app with Uvicorn
"""
import sys
from pathlib import Path

import uvicorn

from app.core.config import settings

# Colors for terminal output
class Colors:
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    CYAN = '\033[96m'
    END = '\033[0m'
    BOLD = '\033[1m'

def print_header():
    print(f"\n{Colors.CYAN}{Colors.BOLD}")
    print("=" * 60)
    print("  Chat Completion Proxy")
    print("  POST /chat -> OpenAI-compatible completions")
    print("=" * 60)
    print(f"{Colors.END}\n")

def check_env_file():
    """Check if .env file exists"""
    env_path = Path(".env")
    if not env_path.exists():
        print(f"{Colors.YELLOW}⚠️  Warning: .env file not found{Colors.END}")
        print(f"   Set OPENAI_API_KEY (and optionally PORT) in the environment or a .env file")
        return False
    print(f"{Colors.GREEN}✓ .env file found{Colors.END}")
    return True

def check_api_key():
    """Check if OPENAI_API_KEY is set"""
    if not settings.api_key_configured():
        print(f"{Colors.YELLOW}⚠️  OPENAI_API_KEY not set{Colors.END}")
        print(f"   /chat will answer 500 'OpenAI API key is not configured'")
        return False
    print(f"{Colors.GREEN}✓ OpenAI API key configured (model: {settings.openai_model}){Colors.END}")
    return True

def check_system_prompt():
    """Check if the system prompt file is readable"""
    path = settings.system_prompt_path
    if not path.is_file():
        print(f"{Colors.RED}✗ System prompt not found at {path}{Colors.END}")
        return False
    print(f"{Colors.GREEN}✓ System prompt found ({path}){Colors.END}")
    return True

def main():
    print_header()

    # Pre-flight checks
    print(f"{Colors.BOLD}Pre-flight checks:{Colors.END}")
    check_env_file()
    check_api_key()
    if not check_system_prompt():
        sys.exit(1)

    print(f"\n{Colors.CYAN}Access URLs:{Colors.END}")
    print(f"  • Chat:     {Colors.BOLD}POST http://localhost:{settings.port}/chat{Colors.END}")
    print(f"  • API Docs: {Colors.BOLD}http://localhost:{settings.port}/docs{Colors.END}")
    print(f"  • Health:   {Colors.BOLD}http://localhost:{settings.port}/health{Colors.END}\n")

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )

if __name__ == "__main__":
    main()
