# -*- mode: python -*-

from rest_framework import serializers

from animals.models import Animal


class AnimalSerializer(serializers.ModelSerializer):
    species = serializers.StringRelatedField()
    sire = serializers.PrimaryKeyRelatedField(read_only=True)
    dam = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = Animal
        fields = (
            "name",
            "uuid",
            "species",
            "sex",
            "sire",
            "dam",
        )


class AnimalDetailSerializer(AnimalSerializer):
    inbreeding = serializers.FloatField(source="inbreeding_coefficient")

    class Meta:
        model = Animal
        fields = (
            "name",
            "uuid",
            "species",
            "sex",
            "sire",
            "dam",
            "created",
            "inbreeding",
        )


class GenerationsSerializer(serializers.Serializer):
    generations = serializers.IntegerField(min_value=0, required=False)


class PairingQuerySerializer(GenerationsSerializer):
    sire = serializers.PrimaryKeyRelatedField(
        queryset=Animal.objects.filter(sex=Animal.Sex.MALE)
    )
    dam = serializers.PrimaryKeyRelatedField(
        queryset=Animal.objects.filter(sex=Animal.Sex.FEMALE)
    )

    def validate(self, data):
        if data["sire"].species != data["dam"].species:
            raise serializers.ValidationError("sire and dam species do not match")
        return data


class PathPairSerializer(serializers.Serializer):
    sire_path = serializers.ListField(child=serializers.CharField())
    dam_path = serializers.ListField(child=serializers.CharField())
    sire_links = serializers.IntegerField()
    dam_links = serializers.IntegerField()
    contribution_pct = serializers.FloatField()


class AncestorBreakdownSerializer(serializers.Serializer):
    ancestor_id = serializers.CharField()
    ancestor_name = serializers.CharField()
    inbreeding_pct = serializers.FloatField()
    contribution_pct = serializers.FloatField()
    path_pairs = PathPairSerializer(many=True)


class InbreedingExplanationSerializer(serializers.Serializer):
    total = serializers.FloatField()
    breakdown = AncestorBreakdownSerializer(many=True)
