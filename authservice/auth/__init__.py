"""
Authentication service for the auth API.

This module provides authentication and authorization services:
- User registration and login
- Password hashing
- JWT token handling
- Role-based access control
"""
