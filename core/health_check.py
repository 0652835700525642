"""
Health Check Service

- Landmark detector state (optionally loads the model)
- Static asset directory
- System metrics (CPU, memory, disk)
"""

import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Any

import psutil
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


class HealthCheckService:
    """Health check service"""

    async def check_detector(self, load: bool = False) -> Dict[str, Any]:
        """
        Check the MediaPipe landmark detector

        Args:
            load: initialise the detector if it has not been used yet

        Returns:
            Dict with status, latency, and error details
        """
        from core import dependencies

        if not load:
            loaded = dependencies.detector_loaded()
            return {
                "status": "healthy" if loaded else "idle",
                "loaded": loaded,
                "message": None if loaded else "Model loads on first request (use ?deep=true to load now)"
            }

        try:
            start_time = time.time()
            await run_in_threadpool(dependencies.get_landmark_detector)
            latency_ms = round((time.time() - start_time) * 1000, 2)
            return {"status": "healthy", "loaded": True, "latency_ms": latency_ms}

        except Exception as e:
            logger.error(f"Detector health check failed: {str(e)}")
            return {
                "status": "unhealthy",
                "loaded": False,
                "error": type(e).__name__,
                "message": str(e)[:100]
            }

    def check_static_assets(self, static_dir: Path) -> Dict[str, Any]:
        """Check the page entry point is present"""
        index = static_dir / "index.html"
        if index.is_file():
            return {"status": "healthy", "path": str(static_dir)}
        return {"status": "unhealthy", "path": str(static_dir), "message": "index.html not found"}

    def get_system_metrics(self) -> Dict[str, Any]:
        """
        Get system resource usage metrics

        Returns:
            Dict with CPU, memory, and disk usage
        """
        try:
            cpu_percent = psutil.cpu_percent(interval=None)
            memory = psutil.virtual_memory()

            try:
                disk = psutil.disk_usage('/')
                disk_info = {
                    "total_gb": round(disk.total / (1024 ** 3), 2),
                    "free_gb": round(disk.free / (1024 ** 3), 2),
                    "percent": disk.percent
                }
            except OSError as e:
                logger.warning(f"Disk usage unavailable: {str(e)}")
                disk_info = {"status": "unavailable", "reason": str(e)}

            return {
                "cpu": {
                    "percent": cpu_percent,
                    "count": psutil.cpu_count()
                },
                "memory": {
                    "total_mb": round(memory.total / (1024 ** 2), 2),
                    "available_mb": round(memory.available / (1024 ** 2), 2),
                    "percent": memory.percent
                },
                "disk": disk_info
            }

        except Exception as e:
            logger.error(f"System metrics error: {str(e)}")
            return {
                "error": str(e),
                "status": "unavailable"
            }

    async def comprehensive_health_check(
        self,
        static_dir: Path,
        include_expensive_checks: bool = False
    ) -> Dict[str, Any]:
        """
        Run all health checks

        Args:
            static_dir: directory the page is served from
            include_expensive_checks: if True, loads the detector model

        Returns:
            Dict with all health check results
        """
        start_time = time.time()

        health_result = {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {}
        }

        health_result["checks"]["system"] = self.get_system_metrics()

        static_result = self.check_static_assets(static_dir)
        health_result["checks"]["static_assets"] = static_result

        detector_result = await self.check_detector(load=include_expensive_checks)
        health_result["checks"]["detector"] = detector_result

        if "unhealthy" in (static_result["status"], detector_result["status"]):
            health_result["status"] = "degraded"

        health_result["check_duration_ms"] = round((time.time() - start_time) * 1000, 2)
        return health_result


# Singleton instance
_health_check_service = None


def get_health_check_service() -> HealthCheckService:
    """Get singleton health check service instance"""
    global _health_check_service

    if _health_check_service is None:
        _health_check_service = HealthCheckService()

    return _health_check_service
