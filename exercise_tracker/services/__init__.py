"""Services — async orchestration of core logic over injected repositories."""
