# backend/travelmap/utils/response_helpers.py
"""
Response Helper Functions

Standardized JSON response bodies for endpoints without a dedicated model.
"""

from typing import Any, Dict, List, Optional, Union


class ResponseFormatter:
    """
    Helper class for creating standardized API responses.
    """

    @staticmethod
    def success(
        message: str, data: Optional[Union[Dict[str, Any], List]] = None, **kwargs
    ) -> Dict[str, Any]:
        """
        Create a standardized success response.

        Args:
            message: Success message
            data: Optional data payload
            **kwargs: Additional fields to include

        Returns:
            Standardized success response
        """
        response = {"success": True, "message": message}

        if data is not None:
            response["data"] = data

        response.update(kwargs)

        return response
