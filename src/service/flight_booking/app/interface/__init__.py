"""Ports implemented by driven adapters"""
