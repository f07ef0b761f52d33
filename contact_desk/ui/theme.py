import flet as ft


class AppTheme:
    """
    Centralized theme configuration for the application.
    Neutral grays with a single blue accent.
    """

    # Colors - Light
    primary_light = "#1f2937"  # Gray 800
    on_primary_light = "#ffffff"
    secondary_light = "#2563eb"  # Blue 600
    surface_light = "#ffffff"
    error_light = "#dc2626"

    # Colors - Dark
    primary_dark = "#e5e7eb"
    on_primary_dark = "#111827"
    secondary_dark = "#60a5fa"
    surface_dark = "#1f2937"

    @classmethod
    def light_theme(cls) -> ft.Theme:
        return ft.Theme(
            color_scheme=ft.ColorScheme(
                primary=cls.primary_light,
                on_primary=cls.on_primary_light,
                secondary=cls.secondary_light,
                surface=cls.surface_light,
                error=cls.error_light,
            ),
            use_material3=True,
        )

    @classmethod
    def dark_theme(cls) -> ft.Theme:
        return ft.Theme(
            color_scheme=ft.ColorScheme(
                primary=cls.primary_dark,
                on_primary=cls.on_primary_dark,
                secondary=cls.secondary_dark,
                surface=cls.surface_dark,
                error=cls.error_light,
            ),
            use_material3=True,
        )
